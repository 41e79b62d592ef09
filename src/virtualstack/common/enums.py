from enum import Enum


class ColormapChoice(Enum):
    GRAY = "gray"
    JET = "jet"
    HOT = "hot"
    BONE = "bone"
    HSV = "hsv"
    COOL = "cool"
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"
    PINK = "pink"
    PARULA = "parula"
    VIRIDIS = "viridis"


class CounterPolicy(Enum):
    RESUME = "resume"
    ZERO = "zero"
