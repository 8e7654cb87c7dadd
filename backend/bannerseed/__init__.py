"""Banner seed migration: fetch remote images, publish them, create banners."""
