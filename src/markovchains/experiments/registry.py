from markovchains.processes import alternating, melody, weather

PROCESS_REGISTRY = {
    "alternating": alternating,
    "weather": weather,
    "melody": melody,
}
