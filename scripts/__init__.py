"""
Command-line scripts for maintaining quiz content in Firestore.

- import_subjects: write subjects into the subjects collection
- import_themes: write themes from a JSON file into the themes collection
- delete_themes_by_subject: delete every theme of one subject
"""
