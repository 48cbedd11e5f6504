import logging

from fastapi import FastAPI, APIRouter, HTTPException
import structlog

from enigma_trace.config import MachineConfiguration
from enigma_trace.errors import ConfigurationError
from enigma_trace.machine import EnigmaMachine
from enigma_trace.models.catalog import ReflectorType, RotorType

from . import models


def configure_logging(level: int = logging.INFO) -> None:
    """JSON log lines at `level` and above; the engine's per-letter debug records are dropped."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


configure_logging()

log = structlog.get_logger(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
)

# Create the FastAPI app
app = FastAPI(title="Enigma Signal Path API")

# Create the router for API endpoints
router = APIRouter()


def build_machine(req: models.ProcessRequest) -> EnigmaMachine:
    """ Every request gets a fresh machine at the requested starting positions. """
    try:
        if req.config is None:
            config = MachineConfiguration.default()
        else:
            config = MachineConfiguration.parse(req.config)
    except ConfigurationError as e:
        log.warning("rejected configuration", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    return EnigmaMachine(config)


@router.post("/process", response_model=models.ProcessResponse)
def process(req: models.ProcessRequest):
    """ Encipher or decipher the given text and return only the result. """
    machine = build_machine(req)
    output = machine.process_string(req.text)
    log.info("processed", letters=len(output), positions="".join(machine.positions))
    return models.ProcessResponse(output=output)


@router.post("/process-detailed", response_model=models.DetailedResponse)
def process_detailed(req: models.ProcessRequest):
    """ Encipher or decipher the given text and return the signal path of every letter. """
    machine = build_machine(req)
    outcomes = machine.process_string_detailed(req.text)
    log.info("processed detailed", letters=len(outcomes), positions="".join(machine.positions))
    return models.DetailedResponse(
        output="".join(outcome.output_letter for outcome in outcomes),
        steps=[models.Step.from_outcome(outcome) for outcome in outcomes],
    )


@router.get("/catalog", response_model=models.CatalogResponse)
def catalog():
    """ Names of the rotors and reflectors that can be installed. """
    return models.CatalogResponse(
        rotors=[rotor.value for rotor in RotorType],
        reflectors=[reflector.value for reflector in ReflectorType],
    )


# Include the router in the app (after all routes are defined)
app.include_router(router, prefix="/api")
