"""
English Coaching Service
========================

Accounts, JWT authentication and ownership-scoped study resources
(notes, words, sentences, lessons).

Version: 0.1.0
"""
