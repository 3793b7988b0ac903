from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Path, Request, status
from fastapi.middleware.cors import CORSMiddleware

from eventstay.booking_service import BookingService
from eventstay.config import get_settings
from eventstay.database import Base, engine
from eventstay.dependencies import get_booking_service, get_current_user_id
from eventstay.errors import register_exception_handlers
from eventstay.logging_middleware import add_audit_middleware
from eventstay.rate_limit import READ_LIMIT, WRITE_LIMIT, apply_rate_limiter, limiter
from eventstay.schemas import BookingIdResponse, BookingRequest, BookingWithRoom, ErrorResponse, RoomRead

settings = get_settings()

FORBIDDEN_OR_MISSING = {
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.run_db_migrations:
        Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    fastapi_app = FastAPI(title="Hotel Booking Service", version="0.1.0", lifespan=lifespan)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    apply_rate_limiter(fastapi_app)
    add_audit_middleware(fastapi_app, "booking")
    register_exception_handlers(fastapi_app)
    return fastapi_app


app = create_app()


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok", "service": "booking"}


@app.get("/booking", response_model=BookingWithRoom, responses=FORBIDDEN_OR_MISSING)
@limiter.limit(READ_LIMIT)
def get_booking(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingWithRoom:
    booking = service.get_booking(user_id)
    return BookingWithRoom(id=booking.id, Room=RoomRead.model_validate(booking.room))


@app.post("/booking", response_model=BookingIdResponse, responses=FORBIDDEN_OR_MISSING)
@limiter.limit(WRITE_LIMIT)
def create_booking(
    request: Request,
    booking_in: BookingRequest,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingIdResponse:
    booking = service.create_booking(user_id, booking_in.room_id)
    return BookingIdResponse(bookingId=booking.id)


@app.put("/booking/{booking_id}", response_model=BookingIdResponse, responses=FORBIDDEN_OR_MISSING)
@limiter.limit(WRITE_LIMIT)
def replace_booking(
    request: Request,
    booking_in: BookingRequest,
    booking_id: int = Path(gt=0),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingIdResponse:
    booking = service.replace_booking(user_id, booking_id, booking_in.room_id)
    return BookingIdResponse(bookingId=booking.id)
