"""SQLModel persistence adapter: table models, repositories and the unit of work."""
