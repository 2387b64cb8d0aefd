"""
Food Data Proxy service package.

The proxy fronts two public food-data APIs behind one endpoint set:
- USDA FoodData Central search, with the private API key added server-side
- Open Food Facts search and product lookup, with search results enriched

Structure:
- app.main: FastAPI app, lifecycle and catch-all route wiring.
- app.routing: path dispatch and legacy request rewriting.
- app.handlers: per-upstream request handling.
- app.ratelimit: fixed-window rate gate and counter stores.
- app.adapters: HTTP client wrapper for upstream calls.
- app.responses: CORS and JSON envelope builders.
- app.domain: request context and product enrichment.
"""
