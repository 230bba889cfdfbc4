"""Core domain types for Syllabus."""
