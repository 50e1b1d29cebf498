"""
Test suite for the manuscript_docx project.
"""
