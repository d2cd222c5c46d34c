"""Local development stack orchestration around docker compose."""
