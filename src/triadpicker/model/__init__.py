"""
The MODEL layer contains pure data structures and the picker's numeric logic.
It has no knowledge of widgets or drawing; the only Qt it touches is the
signal machinery of the weight state and QImage decoding in ``io``.
"""
