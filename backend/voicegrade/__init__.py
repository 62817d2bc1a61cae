"""
VoiceGrade - teacher-voice essay feedback backend.
"""

__version__ = "0.1.0"
