"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, store gateway, settings, logging, Places client, key casing).
Keep feature-specific queries and business logic in the corresponding
feature package (e.g. `verifications/`).
"""
