# aircraftpath/path_planner/constants.py

class PathConstants:
    # Anything shorter than this is treated as a zero-length vector.
    SMALL_NUMBER: float = 1e-4

    # Divides the turn angle to the move-to point to get the number of bezier samples.
    BEZIER_SAMPLE_ANGLE_DIVIDER: float = 2.0
    # Extra samples on the cubic large-turn curve.
    LARGE_TURN_EXTRA_SAMPLES = 2
    # Sideways reach of the large-turn control points relative to the forward reach.
    LARGE_TURN_SIDE_SCALE: float = 1.5

    # Dead zone escape point
    DEAD_ZONE_POINT_DISTANCE_MLT: float = 2.0
    DEAD_ZONE_POINT_ANGLE_DIVIDER: float = 5.0

    # Distance flown past the dive recovery point to restore rotation.
    OUT_OF_DIVE_POINT_OFFSET: float = 1000.0
    MIN_ALPHA: float = 0.001
    MAX_ALPHA: float = 0.999

    # Within this many degrees of 180 the target counts as straight behind.
    DELTA_ANGLE_EXTREME: float = 25.0
    UTURN_APPROACH_POINT_ANGLE: float = 20.0
    # Beyond max dive range times this scale the target counts as extremely far.
    MAX_ATTACK_DISTANCE_SCALE: float = 1.5

    # Fractions used when placing points relative to the dive range band.
    TOO_FAR_GUESS_FRACTION: float = 0.8
    EXTREME_DISTANCE_BEZIER_FRACTION: float = 0.9
    EXTREME_DISTANCE_END_FRACTION: float = 1.2
    BAND_TOO_FAR_FRACTION: float = 0.8
    BAND_TOO_CLOSE_FRACTION: float = 1.2
    TOO_CLOSE_MIN_OFFSET_ANGLE: float = 5.0

    # Tightened tolerances used when trimming a U-turn.
    TRIM_MIN_RANGE_SCALE: float = 1.1
    TRIM_MAX_RANGE_SCALE: float = 0.9
    TRIM_ANGLE_SCALE: float = 0.8


class RollConstants:
    NEIGHBORS = 4
    MAX_NEIGHBOR_DISTANCE: float = 300.0
    BEZIER_ROLL_EXPONENT: float = 0.6
    MIN_ADDED_ROLL: float = 10.0
    MAX_ADDED_ROLL: float = 45.0
