"""Default gameplay and server settings shared across the server modules."""

HOST: str = "0.0.0.0"
PORT: int = 8080
TICK_HZ: int = 20

WORLD_WIDTH: float = 4000.0
WORLD_HEIGHT: float = 4000.0

FOOD_TARGET: int = 1200
FOOD_RADIUS: float = 6.0
FOOD_MASS: float = 1.0

INITIAL_MASS: float = 10.0
BASE_RADIUS: float = 18.0
BASE_SPEED: float = 360.0
DRAG: float = 0.92
RADIUS_GROWTH_FACTOR: float = 1.6
MASS_SLOWDOWN_FACTOR: float = 0.09
SPAWN_HALF_EXTENT: float = 500.0

MAX_NAME_LENGTH: int = 20
MAX_AVATAR_LENGTH: int = 400
DEFAULT_NAME: str = "Player"
HELLO_MESSAGE: str = "stellumin-server"
