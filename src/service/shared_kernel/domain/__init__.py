"""Shared Kernel Domain Layer"""
