# ASL Sign Translator package
__version__ = '1.0.0'
