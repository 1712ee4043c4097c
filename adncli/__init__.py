"""Interactive command-line reader for Adnkronos RSS feeds."""
