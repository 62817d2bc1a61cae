"""
Services package initialization.
"""

from voicegrade.services.document_import import GoogleDocImporter, get_document_importer
from voicegrade.services.essay_analysis import EssayAnalysisService, get_essay_analysis_service
from voicegrade.services.essay_store import EssayStore
from voicegrade.services.profile_compiler import compile_profile
from voicegrade.services.request_builder import ModelRequest, build_analysis_request
from voicegrade.services.response_validator import parse_analysis_response, strip_code_fences

__all__ = [
    "GoogleDocImporter",
    "get_document_importer",
    "EssayAnalysisService",
    "get_essay_analysis_service",
    "EssayStore",
    "compile_profile",
    "ModelRequest",
    "build_analysis_request",
    "parse_analysis_response",
    "strip_code_fences",
]
