"""Project constants and simulation tuning values."""

# Version
__version__ = "0.1.0"

# Frame timing
FRAME_INTERVAL_MS = 16.67  # a frame of this length yields deltaTime == 1.0
CLOCK_STEP = 0.01  # simTime advance per driven frame

# Force model
SPRING_CONSTANT = 0.001
INTERACTION_RADIUS = 10.0
INTERACTION_STRENGTH = 0.05
POINTER_SCALE = 10.0  # [-1, 1] signal space -> world units
DAMPING_FACTOR = 0.98
INITIAL_VELOCITY_JITTER = 0.01  # full width, i.e. +/- 0.005

# Mode-specific force amplitudes
VORTEX_SWIRL = 0.01
FRACTAL_PULSE = 0.005
NEURAL_JITTER = 0.01
FLUID_FLOW = 0.01
FLUID_VORTICITY = 0.003
FLUID_TURBULENCE = 0.05
BIO_MEMBRANE_RADIUS = 3.0
BIO_RETURN = 0.01
BIO_STREAMING = 0.005
BIO_DIVISION_THRESHOLD = 0.8
BIO_DIVISION_PROBABILITY = 0.01
BIO_DIVISION_IMPULSE = 0.1
WEATHER_GROUND_OFFSET = 5.0
WEATHER_RESPAWN_BELOW = -2.0
WEATHER_RESPAWN_PROBABILITY = 0.01
WEATHER_RESPAWN_Y = (8.0, 12.0)
WEATHER_RESPAWN_VY = (-0.15, -0.05)
WEATHER_STORM = 0.1

# Audio / gesture collaborators
AUDIO_SMOOTHING = 0.85
AUDIO_SIZE_PULSE = 0.5
GESTURE_FRAME_SIZE = (80, 60)  # width, height
GESTURE_SAMPLE_STRIDE = 2

__all__ = [
    "__version__",
    "FRAME_INTERVAL_MS",
    "CLOCK_STEP",
    "SPRING_CONSTANT",
    "INTERACTION_RADIUS",
    "INTERACTION_STRENGTH",
    "POINTER_SCALE",
    "DAMPING_FACTOR",
    "INITIAL_VELOCITY_JITTER",
    "VORTEX_SWIRL",
    "FRACTAL_PULSE",
    "NEURAL_JITTER",
    "FLUID_FLOW",
    "FLUID_VORTICITY",
    "FLUID_TURBULENCE",
    "BIO_MEMBRANE_RADIUS",
    "BIO_RETURN",
    "BIO_STREAMING",
    "BIO_DIVISION_THRESHOLD",
    "BIO_DIVISION_PROBABILITY",
    "BIO_DIVISION_IMPULSE",
    "WEATHER_GROUND_OFFSET",
    "WEATHER_RESPAWN_BELOW",
    "WEATHER_RESPAWN_PROBABILITY",
    "WEATHER_RESPAWN_Y",
    "WEATHER_RESPAWN_VY",
    "WEATHER_STORM",
    "AUDIO_SMOOTHING",
    "AUDIO_SIZE_PULSE",
    "GESTURE_FRAME_SIZE",
    "GESTURE_SAMPLE_STRIDE",
]
