from .resolver import BlogCollection, TutorialSeries, default_tutorials
from .models import BlogPost, ContentItem, LookupResult, TutorialChapter

__all__ = [
    "BlogCollection",
    "TutorialSeries",
    "default_tutorials",
    "BlogPost",
    "ContentItem",
    "LookupResult",
    "TutorialChapter",
]
