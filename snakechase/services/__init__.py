"""
Services around the game core: scheduling, UI notifications, video rendering.
"""
