"""Transfer endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from evmsender.transfer import TransferOutcome, TransferRequest, TransferService

router = APIRouter()


# Request/Response models
class TransferPost(BaseModel):
    """Transfer request body."""
    address: str = Field(..., description="Receiver account address")
    network: str = Field(..., description="Network alias or RPC endpoint URL")
    amount: str = Field(..., description="Amount in whole native units, as a decimal string")

    def to_request(self) -> TransferRequest:
        return TransferRequest(
            receiver_address=self.address,
            network=self.network,
            amount=self.amount,
        )


class TransferResponse(BaseModel):
    """Successful transfer."""
    success: bool = True
    tx_id: str
    explorer_url: str


class TransferErrorResponse(BaseModel):
    """Failed transfer."""
    success: bool = False
    message: str


def get_transfer_service() -> TransferService:
    """Dependency returning a service bound to the process signer."""
    return TransferService()


def error_status(outcome: TransferOutcome, service: TransferService) -> int:
    """HTTP status for a failed outcome."""
    if outcome.client_error and service.settings.client_error_status:
        return 400
    return 500


@router.post(
    "/transfer",
    response_model=TransferResponse,
    responses={400: {"model": TransferErrorResponse}, 500: {"model": TransferErrorResponse}},
)
@router.post("/avalanche/request", response_model=TransferResponse, include_in_schema=False)
async def transfer(
    payload: TransferPost,
    service: TransferService = Depends(get_transfer_service),
):
    """Send native asset to an address and wait for confirmation."""
    outcome = await service.execute_transfer(payload.to_request())

    if not outcome.success:
        return JSONResponse(
            status_code=error_status(outcome, service),
            content=TransferErrorResponse(message=outcome.message).model_dump(),
        )

    return TransferResponse(tx_id=outcome.tx_id, explorer_url=outcome.explorer_url)
