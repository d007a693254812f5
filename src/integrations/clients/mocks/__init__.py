"""
Mock integration clients.

These clients return realistic Shopify-shaped data without calling the Shopify API.
They are used when:
- No Shopify access token is available yet
- We want to run a full sync end-to-end from a local export

Important:
- Mock clients must follow the SAME interface as real HTTP clients
  (an async ``fetch()`` returning a FetchResult).

Switching to real:
Set INTEGRATIONS_MODE=real (the default) and SHOPIFY_TOKEN; src/api/main.py
then wires clients/real_http/* instead.
"""
