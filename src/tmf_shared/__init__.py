"""Shared domain models and services for the TMF670 Payment Method API."""
