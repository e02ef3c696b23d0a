"""pkgscript — platform-aware script dispatcher for package managers."""

__version__ = "0.1.0"
