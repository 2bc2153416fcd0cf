"""
Seat Map Service

Seat layout generation, the seat state store and the seat map views that
mirror it through the seat status bus.
"""
