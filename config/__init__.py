"""Configuration settings"""
