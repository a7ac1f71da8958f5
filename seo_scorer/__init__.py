"""SEO scoring service built on FastAPI."""
