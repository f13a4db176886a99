"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (record collections loaded)
- POST /v1/query: Answer a free-text query
- GET /v1/suggestions: Example queries
- POST /v1/reload: Reload the datasets
"""
