"""ROU lease engine — right-of-use lease accounting.

Present value, amortization schedule, current/non-current liability
classification and double-entry journal generation for a lease contract.
"""

__version__ = "1.0.0"
