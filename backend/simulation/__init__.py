from .auto_draft import AutoDraftError, AutoDraftRunner, NoPlayerSelectedError, NotAnAITeamError

__all__ = [
    "AutoDraftError",
    "AutoDraftRunner",
    "NoPlayerSelectedError",
    "NotAnAITeamError",
]
