"""HTTP service exposing the entity emulator."""
