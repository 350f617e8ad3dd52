"""Local file search: in-memory filename and content index with ranked queries."""
