from backend.engine.gamegenerator.generator import GridGenerator

__all__ = ["GridGenerator"]
