"""Seed pipeline stages, one module per entry in PROCESSING_STEPS"""
