"""Certificate state machine: present / forced regeneration / tool selection."""

import os

import pytest

from devstack.certificates import MkcertStrategy, SelfSignedScriptStrategy, certificate_subjects, select_strategy
from devstack.config import ProjectParams
from devstack.errors import PreconditionNotMet
from devstack.process import ProcessResult
from devstack.tasks import CertificateState, generate_certificates


def _no_tool(name):
    return None


def _mkcert_tool(name):
    return "/usr/local/bin/mkcert" if name == "mkcert" else None


def _write_pair(ctx):
    os.makedirs(ctx.certs_dir, exist_ok=True)
    for name in ("cert.pem", "key.pem"):
        with open(os.path.join(ctx.certs_dir, name), "w") as f:
            f.write("pem")


def _self_signed_writes_pair(ctx):
    def responder(command):
        if command.args[0].endswith("generate-ssl.sh"):
            _write_pair(ctx)
        return None

    return responder


# ── strategy selection ──────────────────────────────────────────────


def test_select_mkcert_when_on_path():
    strategy = select_strategy(_mkcert_tool)
    assert isinstance(strategy, MkcertStrategy)
    assert strategy.binary == "/usr/local/bin/mkcert"


def test_select_self_signed_without_mkcert():
    assert isinstance(select_strategy(_no_tool), SelfSignedScriptStrategy)


def test_selection_is_re_evaluated_each_call():
    available = {"mkcert": None}

    def find_tool(name):
        return available.get(name)

    assert isinstance(select_strategy(find_tool), SelfSignedScriptStrategy)
    available["mkcert"] = "/opt/mkcert"
    assert isinstance(select_strategy(find_tool), MkcertStrategy)


def test_certificate_subjects_order(make_context):
    params = ProjectParams(root_domain="app.test", extra_domains=["www.app.test", "api.app.test"])
    ctx = make_context(params=params)
    assert certificate_subjects(ctx) == ["app.test", "*.app.test", "www.app.test", "api.app.test"]


# ── state machine ───────────────────────────────────────────────────


async def test_generate_then_present(ctx, make_recorder):
    recorder = make_recorder(_self_signed_writes_pair(ctx))

    state = await generate_certificates(recorder, ctx, force=False, find_tool=_no_tool)
    assert state is CertificateState.GENERATED
    assert len(recorder.calls) == 1
    assert recorder.argvs[0] == [os.path.join(ctx.root_dir, "infrastructure/docker/services/router/generate-ssl.sh")]

    state = await generate_certificates(recorder, ctx, force=False, find_tool=_no_tool)
    assert state is CertificateState.PRESENT
    assert len(recorder.calls) == 1


async def test_force_deletes_then_regenerates(ctx, make_recorder):
    _write_pair(ctx)
    seen_before_generate = []

    def responder(command):
        seen_before_generate.append(sorted(os.listdir(ctx.certs_dir)))
        _write_pair(ctx)
        return None

    recorder = make_recorder(responder)
    state = await generate_certificates(recorder, ctx, force=True, find_tool=_no_tool)

    assert state is CertificateState.GENERATED
    assert len(recorder.calls) == 1
    assert seen_before_generate == [[]]


async def test_force_tolerates_missing_key(ctx, recorder):
    os.makedirs(ctx.certs_dir, exist_ok=True)
    with open(os.path.join(ctx.certs_dir, "cert.pem"), "w") as f:
        f.write("pem")

    state = await generate_certificates(recorder, ctx, force=True, find_tool=_no_tool)
    assert state is CertificateState.GENERATED
    assert not os.path.exists(os.path.join(ctx.certs_dir, "cert.pem"))


async def test_force_without_existing_files(ctx, recorder):
    state = await generate_certificates(recorder, ctx, force=True, find_tool=_no_tool)
    assert state is CertificateState.GENERATED
    assert len(recorder.calls) == 1


async def test_restart_advice_only_when_forced(ctx, recorder, caplog):
    caplog.set_level("INFO")
    await generate_certificates(recorder, ctx, force=False, find_tool=_no_tool)
    assert "restart" not in caplog.text
    assert "Consider installing mkcert" in caplog.text

    caplog.clear()
    await generate_certificates(recorder, ctx, force=True, find_tool=_no_tool)
    assert "restart the infrastructure" in caplog.text


# ── mkcert path ─────────────────────────────────────────────────────


async def test_mkcert_generates_with_subjects(make_context, make_recorder, tmp_path):
    ca_root = tmp_path / "ca"
    ca_root.mkdir()
    ctx = make_context(params=ProjectParams(root_domain="app.test", extra_domains=["www.app.test"]))

    def responder(command):
        if command.args[1:] == ("-CAROOT",):
            return ProcessResult(0, f"{ca_root}\n")
        return None

    recorder = make_recorder(responder)
    state = await generate_certificates(recorder, ctx, find_tool=_mkcert_tool)

    assert state is CertificateState.GENERATED
    assert recorder.argvs[0] == ["/usr/local/bin/mkcert", "-CAROOT"]
    assert recorder.calls[0][1].quiet is True
    assert recorder.argvs[1] == [
        "/usr/local/bin/mkcert",
        "-cert-file", "infrastructure/docker/services/router/etc/ssl/certs/cert.pem",
        "-key-file", "infrastructure/docker/services/router/etc/ssl/certs/key.pem",
        "app.test", "*.app.test", "www.app.test",
    ]
    assert recorder.commands[1].cwd == ctx.root_dir


async def test_mkcert_without_ca_root_is_hard_stop(ctx, make_recorder, tmp_path):
    def responder(command):
        return ProcessResult(0, str(tmp_path / "missing-ca"))

    recorder = make_recorder(responder)
    with pytest.raises(PreconditionNotMet, match="mkcert -install"):
        await generate_certificates(recorder, ctx, find_tool=_mkcert_tool)

    # Only the CA root query ran; no generation was attempted
    assert len(recorder.calls) == 1
