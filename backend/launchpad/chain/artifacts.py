"""Compiled BeneficiaryFeeRouter artifact (ABI + bytecode)."""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import solcx

logger = logging.getLogger(__name__)

SOLC_VERSION = "0.8.24"
CONTRACT_NAME = "BeneficiaryFeeRouter"


@dataclass(frozen=True)
class ContractArtifact:
    abi: List[dict]
    bytecode: str


def compile_fee_router(source_path: Path) -> ContractArtifact:
    if SOLC_VERSION not in {str(v) for v in solcx.get_installed_solc_versions()}:
        logger.info(f"Installing solc {SOLC_VERSION}")
        solcx.install_solc(SOLC_VERSION)
    compiled = solcx.compile_files(
        [str(source_path)],
        output_values=["abi", "bin"],
        solc_version=SOLC_VERSION,
        optimize=True,
        optimize_runs=200,
    )
    key = next(k for k in compiled if k.endswith(f":{CONTRACT_NAME}"))
    return ContractArtifact(abi=compiled[key]["abi"], bytecode="0x" + compiled[key]["bin"])


def write_artifact(artifact: ContractArtifact, artifact_path: Path) -> None:
    artifact_path.parent.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(json.dumps({"abi": artifact.abi, "bytecode": artifact.bytecode}, indent=2))


def load_fee_router_artifact(artifact_path: Path, source_path: Path) -> ContractArtifact:
    """Read the artifact from disk, compiling and caching it on first use."""
    if artifact_path.exists():
        data = json.loads(artifact_path.read_text())
        return ContractArtifact(abi=data["abi"], bytecode=data["bytecode"])
    logger.warning(f"{artifact_path} missing, compiling {source_path}")
    artifact = compile_fee_router(source_path)
    write_artifact(artifact, artifact_path)
    return artifact
