"""Playwright binding between a live survey page and a SurveySession."""

from .binding import LiveSurveyBinding

__all__ = ["LiveSurveyBinding"]
