"""Shared pytest fixtures for fnbledger tests."""

import json
import tempfile
import os
import pytest

from fnbledger.database.factories import create_sqlite_database
from fnbledger.domain.entities import DayRecord


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a temporary file and return its path."""

    def _write(document, name="export.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write


# Day-record builders


def channel(qtd=0, vtotal=0):
    return {"qtd": qtd, "vtotal": vtotal}


def flat_period(**channels):
    return {"channels": dict(channels)}


def shift_period(**sub_tabs):
    """Build a shift payload; each keyword is a sub-tab name."""
    return {"subTabs": dict(sub_tabs)}


def make_record(day_id="2024-03-15", **periods):
    return DayRecord(id=day_id, periods=periods)


@pytest.fixture
def full_day():
    """A day with every period filled, old and new form figures mixed."""
    return make_record(
        "2024-03-15",
        madrugada=flat_period(
            madrugadaRoomServiceQtdPedidos=channel(qtd=2),
            madrugadaRoomServiceQtdPratos=channel(qtd=3),
            madrugadaRoomServicePagDireto=channel(vtotal=60),
            madrugadaRoomServiceValorServico=channel(vtotal=6),
        ),
        cafeDaManha=flat_period(
            cdmListaHospedes=channel(40, 2000),
            cdmNoShow=channel(2, 100),
            cdmSemCheckIn=channel(1, 50),
            cdmCafeAssinado=channel(3, 150),
            cdmDiretoCartao=channel(2, 110),
        ),
        almocoPrimeiroTurno=shift_period(
            roomService={
                "channels": {
                    "aptRoomServiceQtdPedidos": channel(qtd=4),
                    "aptRoomServicePagDireto": channel(vtotal=200),
                    "aptRoomServiceValorServico": channel(vtotal=20),
                }
            },
            hospedes={"channels": {"aptHospedesPensao": channel(5, 250)}},
            clienteMesa={
                "channels": {
                    "aptClienteMesaDinheiro": channel(3, 150),
                    "aptClienteMesaCredito": channel(7, 350),
                }
            },
            delivery={"channels": {"aptDeliveryIfood": channel(1, 40)}},
            ciEFaturados={
                "channels": {
                    "aptCiEFaturadosFaturadosQtd": channel(qtd=2),
                    "aptCiEFaturadosValorHotel": channel(vtotal=60),
                    "aptCiEFaturadosValorFuncionario": channel(vtotal=40),
                    "aptCiEFaturadosConsumoInternoQtd": channel(qtd=3),
                    "aptCiEFaturadosTotalCI": channel(vtotal=90),
                    "aptCiEFaturadosReajusteCI": channel(vtotal=10),
                }
            },
            frigobar={
                "channels": {
                    "frgPTTotalQuartos": channel(qtd=2),
                    "frgPTPagRestaurante": channel(vtotal=30),
                    "frgPTPagHotel": channel(vtotal=20),
                }
            },
        ),
        almocoSegundoTurno=shift_period(
            clienteMesa={"channels": {"astClienteMesaPix": channel(2, 100)}},
            faturado={
                "faturadoItems": [
                    {"clientName": "Sala 3", "type": "hotel", "quantity": 1, "value": 45},
                ]
            },
            consumoInterno={
                "consumoInternoItems": [
                    {"clientName": "Cozinha", "quantity": 2, "value": 30},
                ],
                "channels": {"reajusteCI": channel(vtotal=5)},
            },
        ),
        jantar=shift_period(
            clienteMesa={"channels": {"jntClienteMesaDebito": channel(6, 420)}},
            consumoInterno={
                "consumoInternoItems": [
                    {"clientName": "Gerência", "quantity": 1, "value": 25},
                ],
            },
            frigobar={
                "channels": {
                    "frgJNTTotalQuartos": channel(qtd=1),
                    "frgJNTPagHotel": channel(vtotal=15),
                }
            },
        ),
        breakfast=flat_period(breakfastAvulso=channel(4, 120)),
        baliHappy=flat_period(baliHappyDrinks=channel(10, 300)),
        eventos={
            "items": [
                {
                    "subEvents": [
                        {"location": "DIRETO", "quantity": 20, "totalValue": 1000},
                        {"location": "HOTEL", "quantity": 10, "totalValue": 700},
                    ]
                }
            ]
        },
    )
