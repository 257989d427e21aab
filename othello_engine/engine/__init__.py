"""Bitboard engine core"""
