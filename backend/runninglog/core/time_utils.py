from runninglog.core.constants import TIME_OF_DAY_STARTS


def hhmmss_to_seconds(hhmmss: str) -> int:
    """
    Convert 'HH:MM:SS' (or 'MM:SS') -> total seconds (int).
    Example: '00:45:32' -> 2732, '45:32' -> 2732
    """
    parts = hhmmss.strip().split(":")
    if len(parts) == 2:
        parts = ["0"] + parts
    if len(parts) != 3:
        raise ValueError("Duration must be in HH:MM:SS or MM:SS format")

    try:
        hours, minutes, seconds = map(int, parts)
    except ValueError:
        raise ValueError(f"Invalid duration: {hhmmss!r}")
    if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
        raise ValueError(f"Invalid duration: {hhmmss!r}")
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def compute_pace(duration_seconds: int, distance_km: float) -> str:
    """
    Compute pace per kilometre as 'M:SS/km'.
    Example: duration=1500 sec, distance=5.0 -> '5:00/km'
    """
    if distance_km <= 0:
        return "0:00/km"

    pace_sec = int(duration_seconds / distance_km)

    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}/km"


def time_of_day_for(hour: int) -> str:
    if not 0 <= hour <= 23:
        raise ValueError("hour must be within 0..23")
    label = TIME_OF_DAY_STARTS[0][1]
    for start, name in TIME_OF_DAY_STARTS:
        if hour >= start:
            label = name
    return label
