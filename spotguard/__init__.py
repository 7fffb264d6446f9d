"""
spotguard - self-healing watchdog for an Azure Spot VM
"""

__version__ = "1.0.0"
