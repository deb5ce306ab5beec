# Utility functions package
