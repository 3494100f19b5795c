# Domain Review Package
from .models import Grade, MasteryStatus, ReviewItem
from .ports import Clock, RandomSource, ReviewRepository

__all__ = ["Grade", "MasteryStatus", "ReviewItem", "Clock", "RandomSource", "ReviewRepository"]
