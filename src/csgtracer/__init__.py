# __init__.py
"""
csgtracer: an offline path tracer for scenes made of planes, spheres and
cubes combined with constructive solid geometry.
"""
__version__ = "0.1.0"
