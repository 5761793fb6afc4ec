"""codehints - mode-aware completion hints for editor hosts."""
