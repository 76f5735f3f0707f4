"""
Simple end-to-end JPYC payment roundtrip example.

This simulates:

1. A shop generating a payment URI (and QR code) for a purchase.
2. A wallet scanning the URI and reading back what it is asked to pay.
3. The shop checking that the URI pays the right address.
"""

from jpycpay.integration.merchant import (
    MerchantConfig,
    build_merchant_payment_uri,
    parse_payment_request,
    verify_payment_request,
)
from jpycpay.qr_payloads import generate_qr_from_uri


def main() -> None:
    # 1. Merchant configuration
    shop = MerchantConfig(
        merchant_address="0x1234567890123456789012345678901234567890",
        network="polygon",
    )

    # 2. Shop builds a URI for 1,500.25 JPY and renders it for the terminal
    result = build_merchant_payment_uri(shop, "1500.25")
    print("Payment URI:")
    print(result.uri)
    print()
    for w in result.warnings:
        print(f"warning [{w.code}]: {w.message}")

    qr = generate_qr_from_uri(result.uri, "utf8")
    print(qr.data)

    # 3. Wallet side: decode and re-validate the scanned URI
    request = parse_payment_request(result.uri, expected_network="polygon")
    print("Wallet sees:")
    print(f"  pay {request.amount_jpy} JPYC to {request.recipient_address}")
    print(f"  on {request.network.value} (chain {request.chain_id})")
    print()

    # 4. Shop side: confirm the URI targets this merchant
    ok = verify_payment_request(shop, result.uri)
    print("Merchant verification result:", ok)


if __name__ == "__main__":
    main()
