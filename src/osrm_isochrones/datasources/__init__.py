"""Routing backends that can act as a cost sampler.

Each subdirectory is one backend with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, config
    └── {service}.py      # Fetch functions and the sampler class

Adding a backend
----------------
1. Create ``datasources/{name}/`` with the files above.

2. Implement a class with ``query_costs(origin, destinations)`` returning a
   ``CostQueryResult`` (see ``core.models.CostSampler``). Raise
   ``SamplerFailureError`` on any transport or payload problem, chained
   from the original exception.

3. Re-export the public API in ``__init__.py`` with ``__all__``.

4. Add tests in ``tests/test_{name}.py`` with the HTTP session mocked.
"""
