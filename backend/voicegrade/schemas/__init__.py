"""
Schemas package initialization.
"""

from voicegrade.schemas.analysis import (
    CONFIDENCE_LEVELS,
    COMMENT_CATEGORIES,
    COMMENT_SEVERITIES,
    AnalyzeRequest,
    AnalyzeResponse,
    AnalysisResult,
    GradePredictionResult,
    InlineCommentResult,
)
from voicegrade.schemas.auth import StudentResponse
from voicegrade.schemas.directory import (
    SchoolCreate,
    SchoolResponse,
    TeacherCreate,
    TeacherResponse,
)
from voicegrade.schemas.documents import (
    GoogleDocImportRequest,
    GoogleDocImportResponse,
    ImportedComment,
)
from voicegrade.schemas.essay import (
    EndCommentRecord,
    EssayDetail,
    EssayListItem,
    EssayListResponse,
    GradePredictionRecord,
    InlineCommentRecord,
)
from voicegrade.schemas.settings import AIConfigResponse, AIConfigUpdate

__all__ = [
    # Analysis
    "CONFIDENCE_LEVELS",
    "COMMENT_CATEGORIES",
    "COMMENT_SEVERITIES",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AnalysisResult",
    "GradePredictionResult",
    "InlineCommentResult",
    # Auth
    "StudentResponse",
    # Directory
    "SchoolCreate",
    "SchoolResponse",
    "TeacherCreate",
    "TeacherResponse",
    # Documents
    "GoogleDocImportRequest",
    "GoogleDocImportResponse",
    "ImportedComment",
    # Essays
    "EndCommentRecord",
    "EssayDetail",
    "EssayListItem",
    "EssayListResponse",
    "GradePredictionRecord",
    "InlineCommentRecord",
    # Settings
    "AIConfigResponse",
    "AIConfigUpdate",
]
