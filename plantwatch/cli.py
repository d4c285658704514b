"""PlantWatch CLI — main entry point for `plantwatch`."""


def main():
    """Start PlantWatch server."""
    import uvicorn
    from plantwatch.api.main import create_app
    from plantwatch.core.config import get_settings

    settings = get_settings()

    print("PlantWatch — plant care versus historical weather")
    print(f"   Starting on http://{settings.host}:{settings.port}")
    print(f"   API Docs:  http://{settings.host}:{settings.port}/docs")
    print("")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
