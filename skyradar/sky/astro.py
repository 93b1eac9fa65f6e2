import datetime
import math

from skyradar.types import HorizontalPosition

J2000_JD = 2451545.0

SYNODIC_MONTH_DAYS = 29.53
# Known new moon used as the phase epoch
REFERENCE_NEW_MOON_UTC = datetime.datetime(2000, 1, 6, 18, 14, tzinfo=datetime.timezone.utc)

MOON_CRESCENT_WAXING = "moon-crescent-waxing"
MOON_HALF_WAXING = "moon-half-waxing"
MOON_FULL = "moon-full"
MOON_HALF_WANING = "moon-half-waning"
MOON_CRESCENT_WANING = "moon-crescent-waning"

# (start_day, end_day, phase id); ages outside every band are new moon
_PHASE_BANDS = (
    (1.85, 5.5, MOON_CRESCENT_WAXING),
    (5.5, 9.2, MOON_HALF_WAXING),
    (9.2, 20.3, MOON_FULL),
    (20.3, 24.0, MOON_HALF_WANING),
    (24.0, 27.7, MOON_CRESCENT_WANING),
)

CIVIL_TWILIGHT_DEG = -6.0

_TWO_PI = 2.0 * math.pi
# Mean sidereal time at J2000 and its rate, in hours
_GMST_AT_J2000_H = 18.697374558
_GMST_RATE_H_PER_DAY = 24.06570982441908


def _as_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def julian_date(dt: datetime.datetime) -> float:
    dt = _as_utc(dt)
    year = dt.year
    month = dt.month
    day = dt.day + (dt.hour + (dt.minute + (dt.second + dt.microsecond / 1e6) / 60.0) / 60.0) / 24.0
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    jd = math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + b - 1524.5
    return jd


def days_since_j2000(dt: datetime.datetime) -> float:
    return julian_date(dt) - J2000_JD


def _wrap_rad(angle: float) -> float:
    return angle % _TWO_PI


def greenwich_sidereal_time_rad(dt: datetime.datetime) -> float:
    hours = (_GMST_AT_J2000_H + _GMST_RATE_H_PER_DAY * days_since_j2000(dt)) % 24.0
    return _wrap_rad(hours * math.pi / 12.0)


def local_sidereal_time_rad(dt: datetime.datetime, longitude_deg: float) -> float:
    return _wrap_rad(greenwich_sidereal_time_rad(dt) + math.radians(longitude_deg))


def hour_angle_rad(ra_rad: float, dt: datetime.datetime, longitude_deg: float) -> float:
    return _wrap_rad(local_sidereal_time_rad(dt, longitude_deg) - ra_rad)


def ra_dec_to_alt_az(
    ra_rad: float,
    dec_rad: float,
    lat_rad: float,
    lon_deg: float,
    dt: datetime.datetime,
) -> tuple[float, float]:
    """Equatorial to horizontal; azimuth runs from North through East."""
    ha = hour_angle_rad(ra_rad, dt, lon_deg)
    sin_dec, cos_dec = math.sin(dec_rad), math.cos(dec_rad)
    sin_lat, cos_lat = math.sin(lat_rad), math.cos(lat_rad)

    sin_alt = sin_dec * sin_lat + cos_dec * cos_lat * math.cos(ha)
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))
    # Both terms scaled by cos(dec) so the poles need no tan()
    az = math.atan2(-cos_dec * math.sin(ha), sin_dec * cos_lat - sin_lat * cos_dec * math.cos(ha))
    return alt, _wrap_rad(az)


def _obliquity_rad(days: float) -> float:
    return math.radians(23.439 - 0.0000004 * days)


def _mean_angle_rad(at_epoch_deg: float, rate_deg_per_day: float, days: float) -> float:
    return math.radians((at_epoch_deg + rate_deg_per_day * days) % 360.0)


def _ecliptic_to_equatorial(longitude: float, latitude: float, days: float) -> tuple[float, float]:
    """Ecliptic (lambda, beta) to (ra, dec), all radians."""
    eps = _obliquity_rad(days)
    sin_dec = math.sin(latitude) * math.cos(eps) + math.cos(latitude) * math.sin(eps) * math.sin(longitude)
    dec = math.asin(max(-1.0, min(1.0, sin_dec)))
    ra = math.atan2(
        math.sin(longitude) * math.cos(eps) - math.tan(latitude) * math.sin(eps),
        math.cos(longitude),
    )
    return _wrap_rad(ra), dec


def sun_ra_dec_rad(dt: datetime.datetime) -> tuple[float, float]:
    days = days_since_j2000(dt)
    mean_longitude = _mean_angle_rad(280.460, 0.9856474, days)
    mean_anomaly = _mean_angle_rad(357.528, 0.9856003, days)
    # Equation of centre, two terms
    longitude = mean_longitude + math.radians(
        1.915 * math.sin(mean_anomaly) + 0.020 * math.sin(2.0 * mean_anomaly)
    )
    return _ecliptic_to_equatorial(longitude, 0.0, days)


def moon_ra_dec_rad(dt: datetime.datetime) -> tuple[float, float]:
    days = days_since_j2000(dt)
    mean_longitude = _mean_angle_rad(218.316, 13.176396, days)
    mean_anomaly = _mean_angle_rad(134.963, 13.064993, days)
    latitude_argument = _mean_angle_rad(93.272, 13.229350, days)
    longitude = mean_longitude + math.radians(6.289 * math.sin(mean_anomaly))
    latitude = math.radians(5.128 * math.sin(latitude_argument))
    return _ecliptic_to_equatorial(longitude, latitude, days)


def _horizontal(ra: float, dec: float, dt: datetime.datetime, latitude_deg: float, longitude_deg: float) -> HorizontalPosition:
    alt, az = ra_dec_to_alt_az(ra, dec, math.radians(latitude_deg), longitude_deg, dt)
    return HorizontalPosition(azimuth_deg=math.degrees(az), elevation_deg=math.degrees(alt))


def sun_position(dt: datetime.datetime, latitude_deg: float, longitude_deg: float) -> HorizontalPosition:
    ra, dec = sun_ra_dec_rad(dt)
    return _horizontal(ra, dec, dt, latitude_deg, longitude_deg)


def moon_position(dt: datetime.datetime, latitude_deg: float, longitude_deg: float) -> HorizontalPosition:
    ra, dec = moon_ra_dec_rad(dt)
    return _horizontal(ra, dec, dt, latitude_deg, longitude_deg)


def is_daytime(
    dt: datetime.datetime,
    latitude_deg: float | None = None,
    longitude_deg: float | None = None,
    threshold_deg: float = CIVIL_TWILIGHT_DEG,
    day_start_hour: int = 6,
    day_end_hour: int = 20,
) -> bool:
    if latitude_deg is None or longitude_deg is None:
        # Without a location fall back to the instant's own wall clock
        return day_start_hour <= dt.hour < day_end_hour
    return sun_position(dt, latitude_deg, longitude_deg).elevation_deg > threshold_deg


def moon_age_days(dt: datetime.datetime) -> float:
    days = (_as_utc(dt) - REFERENCE_NEW_MOON_UTC).total_seconds() / 86400.0
    return days % SYNODIC_MONTH_DAYS


def moon_phase_id(dt: datetime.datetime) -> str | None:
    age = moon_age_days(dt)
    for start, end, phase in _PHASE_BANDS:
        if start <= age < end:
            return phase
    return None


def angular_separation_rad(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    # Haversine form keeps precision for nearly coincident bodies
    h = math.sin((dec2 - dec1) / 2.0) ** 2 + math.cos(dec1) * math.cos(dec2) * math.sin((ra2 - ra1) / 2.0) ** 2
    return 2.0 * math.asin(math.sqrt(min(max(h, 0.0), 1.0)))


def moon_elongation_rad(dt: datetime.datetime) -> float:
    return angular_separation_rad(*sun_ra_dec_rad(dt), *moon_ra_dec_rad(dt))


def moon_illumination_fraction(dt: datetime.datetime) -> float:
    # Phase angle taken as 180 degrees minus the elongation
    return (1.0 - math.cos(moon_elongation_rad(dt))) / 2.0
