"""
Real HTTP integration clients.

These clients talk to real external systems via HTTP:
- Shopify Admin REST API (product listing)

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in src/api/main.py only.
"""
