from backend.engine.animation.engine import (
    AnimationEngine,
    AnimState,
    PointerTrail,
    ScoreTicker,
    TickResult,
    TileToken,
    ease_out_cubic,
)

__all__ = [
    "AnimState",
    "AnimationEngine",
    "PointerTrail",
    "ScoreTicker",
    "TickResult",
    "TileToken",
    "ease_out_cubic",
]
