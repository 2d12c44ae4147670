"""API module for the media library.

The api layer:
- Validates inputs, reads/writes DB through the entry service
- Returns enveloped payloads for the UI
"""
