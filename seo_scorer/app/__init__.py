"""FastAPI application for the SEO scorer."""
