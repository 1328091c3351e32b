"""
Fridge Chef: recipe suggestions from the ingredients in your fridge
"""
__version__ = "1.0.0"
