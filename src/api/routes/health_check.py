from fastapi import APIRouter, status

from src.api.response import ApiResponse, success

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_model=ApiResponse[str])
async def health_check():
    return success("Server is running!")
