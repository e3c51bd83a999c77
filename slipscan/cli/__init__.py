"""Unified command-line interface for slipscan.

Usage:
    slipscan parse <text-file|->
    slipscan scan <image> [--ocr-url URL] [--user ID]
    slipscan list [--category C] [--from D] [--to D] [--min N] [--max N] [--limit N]
    slipscan analytics [--from D] [--to D] [--user ID]
    slipscan delete <id> [--delete-image]
"""
