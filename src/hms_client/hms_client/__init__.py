"""HMS desktop client package.

This package is organized by feature modules (shifts, ...) with a thin Flask
controller layer over session/repository layers that talk to the HMS REST API.
"""
