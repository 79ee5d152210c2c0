from backend.engine.gameplay.game import (
    SHUFFLE_MESSAGE,
    GamePlay,
    SubmitStatus,
    TurnResult,
)

__all__ = ["GamePlay", "SHUFFLE_MESSAGE", "SubmitStatus", "TurnResult"]
