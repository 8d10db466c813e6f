"""Dashboard logic used by handlers.

Services are imported lazily by handlers so a cold start only pays for the
data source it actually uses (SQLAlchemy is skipped for the in-memory one).
"""

# Do NOT import services here - use lazy loading in handlers instead
