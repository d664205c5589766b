"""
Feature interfaces for the Instagram SDK.

This package defines request option DTOs and the client protocols for:
- Feeds and the home timeline (`feed.py`)
- Direct messaging (`inbox.py`)

Application code depends only on these interfaces; the concrete
implementation lives under `instagram_sdk.client`.
"""
