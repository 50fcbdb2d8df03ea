"""Today Viral: share and browse viral videos from TikTok, Instagram, YouTube and Facebook."""

__version__ = "0.1.0"
