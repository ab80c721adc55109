"""FastAPI application for the TMF670 Payment Method API."""
