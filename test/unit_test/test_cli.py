"""
Unit tests for the command line entry point (pipeline mocked)
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from permit2_swap import __main__ as cli
from permit2_swap.errors import ConfigurationError, SignerError, QuoteUnavailable
from permit2_swap.types import SwapResult


def _run(argv, pipeline=None, startup_error=None):
    with patch.object(cli, "setup_logging"), patch.object(cli, "SwapPipeline") as pipeline_cls:
        if startup_error is not None:
            pipeline_cls.from_config.side_effect = startup_error
        else:
            pipeline_cls.from_config.return_value = pipeline
        return cli.main(argv)


def _pipeline(result):
    pipeline = MagicMock()
    pipeline.__enter__.return_value = pipeline
    pipeline.__exit__.return_value = False
    pipeline.execute.return_value = result
    return pipeline


def test_parse_args():
    """Test argument defaults and flags"""
    print("Testing parse_args...")

    args = cli.parse_args([])
    assert args.sell_token == cli.config.trading.sell_token
    assert args.list_sources is True

    args = cli.parse_args([
        "--sell-token", "USDC",
        "--buy-token", "WETH",
        "--amount", "25",
        "--affiliate-fee-bps", "50",
        "--no-surplus",
        "--no-sources",
    ])
    assert args.sell_token == "USDC"
    assert args.amount == "25"
    assert args.affiliate_fee_bps == 50
    assert args.surplus_collection is False
    assert args.list_sources is False

    print("  parse_args: PASSED")


def test_exit_code_submitted():
    """Test exit 0 after broadcast"""
    print("Testing exit code on submit...")

    pipeline = _pipeline(SwapResult.pending("0xabc"))
    assert _run(["--amount", "0.1"], pipeline) == 0
    pipeline.list_liquidity_sources.assert_called_once()
    kwargs = pipeline.build_trade_request.call_args[1]
    assert pipeline.build_trade_request.call_args[0][2] == "0.1"
    assert "affiliate_fee_bps" in kwargs
    pipeline.execute.assert_called_once_with(pipeline.build_trade_request.return_value)

    print("  exit code on submit: PASSED")


def test_exit_code_skipped():
    """Test exit 0 when nothing needed submitting"""
    print("Testing exit code on skip...")

    pipeline = _pipeline(SwapResult.skipped("Quote has no Permit2 payload"))
    assert _run(["--no-sources"], pipeline) == 0
    pipeline.list_liquidity_sources.assert_not_called()

    print("  exit code on skip: PASSED")


def test_exit_code_failed():
    """Test exit 1 when a stage failed"""
    print("Testing exit code on failure...")

    error = QuoteUnavailable.timeout("swap/permit2/quote", 30.0)
    pipeline = _pipeline(SwapResult.failed(str(error), error_code=error.code.value))
    assert _run(["--no-sources"], pipeline) == 1

    print("  exit code on failure: PASSED")


def test_exit_code_configuration():
    """Test exit 2 on startup or trade configuration errors"""
    print("Testing exit code on configuration error...")

    assert _run([], startup_error=ConfigurationError.missing("PRIVATE_KEY")) == 2
    assert _run([], startup_error=SignerError.failed("invalid private key format")) == 2

    pipeline = _pipeline(SwapResult.pending("0xabc"))
    pipeline.build_trade_request.side_effect = ConfigurationError.invalid("token", "Unknown token 'X'")
    assert _run(["--no-sources"], pipeline) == 2
    pipeline.execute.assert_not_called()

    print("  exit code on configuration error: PASSED")


def main():
    """Run all CLI tests"""
    print("=" * 60)
    print("CLI Tests")
    print("=" * 60)

    tests = [
        test_parse_args,
        test_exit_code_submitted,
        test_exit_code_skipped,
        test_exit_code_failed,
        test_exit_code_configuration,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
