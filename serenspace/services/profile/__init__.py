from serenspace.services.profile.streak_tracker import StreakTracker

__all__ = ["StreakTracker"]
