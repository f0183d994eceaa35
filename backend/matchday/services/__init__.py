"""
Services Layer

Business logic for draws, fixture generation, scoring and standings:
- Accept domain inputs (players, teams, assignments, fixtures)
- Return domain outputs (pairs, fixture drafts, standing rows)
- Do NOT depend on HTTP request/response objects
- Only session_store talks to the database
"""
