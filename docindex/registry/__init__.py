"""Registry — late-binding rendezvous between per-crate payloads and the page.

The registry provides:
- Contributors: per-crate payloads handed to the page, or parked if early
- Registrar: merges implementor records in arrival order, ignoring duplicates
- Sidebar builder: receives the item index for a crate's page
"""
