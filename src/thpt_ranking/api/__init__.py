"""HTTP API for THPT Ranking."""
