"""
Clipclean watches the clipboard and strips tracking parameters from the
URLs copied into it.
"""
