"""HTTP API for Syllabus."""
