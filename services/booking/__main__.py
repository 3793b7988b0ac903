import uvicorn

from eventstay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("services.booking.app:app", host="0.0.0.0", port=settings.booking_service_port)


if __name__ == "__main__":
    main()
