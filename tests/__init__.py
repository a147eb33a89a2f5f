"""
Test suite for the pagefill project.
"""
