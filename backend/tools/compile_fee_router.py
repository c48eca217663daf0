#!/usr/bin/env python3
"""Compile contracts/BeneficiaryFeeRouter.sol into the JSON artifact the backend deploys."""
from launchpad.chain.artifacts import compile_fee_router, write_artifact
from launchpad.chain.provider import resolve_path
from launchpad.core.config import get_settings

settings = get_settings()
source_path = resolve_path(settings.fee_router_source_path)
artifact_path = resolve_path(settings.fee_router_artifact_path)

print(f"Compiling {source_path}...")
artifact = compile_fee_router(source_path)
write_artifact(artifact, artifact_path)
print(f"✓ Wrote {artifact_path} ({len(artifact.abi)} ABI entries, {len(artifact.bytecode) // 2 - 1} bytes)")
