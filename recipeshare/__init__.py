"""
recipeshare backend.

Flask API for recipe creation and display. Recipe images and documents are
stored in Postgres `bytea` columns behind Supabase; the `media` package moves
them between the upload, storage and display encodings.
"""
