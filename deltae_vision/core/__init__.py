"""deltae_vision.core — Foundation layer.

Colour conversion, Delta E formulas, the palette matcher, k-means, analysis,
configuration, sampling and the report builder. This package has NO
dependencies on deltae_vision.techniques or deltae_vision.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
