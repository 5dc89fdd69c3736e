"""Analysis techniques, one per module.

Each module defines `technique = Technique(...)` and decorates its run
function with `@technique.run`. deltae_vision.registry finds them by name.
"""
