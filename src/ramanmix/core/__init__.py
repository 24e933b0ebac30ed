"""Core numerical and domain layers of ramanmix."""
