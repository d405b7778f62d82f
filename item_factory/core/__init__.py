"""Item Factory core: profiles, prompts, parsing, storage"""
__version__ = "0.1.0"
