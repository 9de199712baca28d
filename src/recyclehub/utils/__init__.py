"""Pure helper utilities: slugs and pagination."""
