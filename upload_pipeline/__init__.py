"""Store uploaded files and derived images for records at lifecycle points."""
