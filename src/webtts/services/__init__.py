"""
webtts Services Layer.

This package provides the logic between the API/CLI surfaces and the
cloud client.

Components:
    - tts_service.py: WebTTSService (configuration, capabilities, synthesis)
    - validators.py: Request validation returning explicit outcomes
"""
from .tts_service import WebTTSService, get_service, reset_service
from .validators import SynthesisRequest, Validation, check_request

__all__ = [
    "WebTTSService",
    "get_service",
    "reset_service",
    "SynthesisRequest",
    "Validation",
    "check_request",
]
