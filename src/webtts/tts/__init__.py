"""
Text-to-Speech Client Components.

This package talks to the remote endpoint and models its capabilities:
    - cloud.py: Request URL building and response classification
    - capabilities.py: Fixed locale, voice and format tables
    - formats.py: AudioFormat descriptor
    - stream.py: AudioStream over an open HTTP response
"""
