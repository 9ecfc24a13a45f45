"""
English Coaching Test Suite
"""
