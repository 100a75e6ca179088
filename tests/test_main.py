import pytest
import pytest_mock

from vyom.config import config
from vyom.main import SERVICES, main


def test_main_runs_the_chosen_service(mocker: pytest_mock.MockerFixture) -> None:
    run = mocker.patch("uvicorn.run")
    mocker.patch("vyom.main.configure_logging")

    main(["outfit", "--port", "9003"])

    run.assert_called_once_with(
        "vyom.services.outfits:app",
        host=config.HOST_URL,
        port=9003,
        log_level=config.LOG_LEVEL.lower(),
    )


def test_main_defaults_to_the_service_port(mocker: pytest_mock.MockerFixture) -> None:
    run = mocker.patch("uvicorn.run")
    mocker.patch("vyom.main.configure_logging")

    main(["gateway", "--host", "0.0.0.0"])

    assert run.call_args.kwargs["host"] == "0.0.0.0"
    assert run.call_args.kwargs["port"] == SERVICES["gateway"][1]


def test_main_rejects_unknown_services() -> None:
    with pytest.raises(SystemExit):
        main(["billing"])
