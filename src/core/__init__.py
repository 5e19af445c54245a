"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the extension
framework: measurable spaces, measures, normed spaces, linear maps,
simple functions and elements of L¹.
"""
