"""Core NFO generation: probing, classification, rendering and assembly."""
