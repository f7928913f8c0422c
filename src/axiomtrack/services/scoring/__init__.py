"""Token signal scoring."""

from axiomtrack.services.scoring.token_analyzer import analyze_token, analyze_tokens

__all__ = ["analyze_token", "analyze_tokens"]
