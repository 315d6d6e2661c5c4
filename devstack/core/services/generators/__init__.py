"""
Generators: produce configuration documents from typed data.

    precommit.py: hook pipeline and hook manifest for pre-commit
"""
