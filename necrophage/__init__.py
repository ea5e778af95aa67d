"""Game rules for an isometric parasite action RPG: combat, enemy AI, bosses, camera and reports."""

__version__ = "0.1.0"