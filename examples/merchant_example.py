"""
Simple merchant usage example (server-side). Charges a test card, then refunds
the charge using the authorization returned by the purchase.
"""
from beanstream_sdk.config import BeanstreamSettings
from beanstream_sdk.connectors import Address, BeanstreamConnector, Card, PaymentOptions

def run():
    # reads BEANSTREAM_LOGIN, BEANSTREAM_USER, BEANSTREAM_PASSWORD from the environment
    connector = BeanstreamConnector(BeanstreamSettings())
    card = Card(
        name="Longbob Longsen",
        number="4030000010001234",
        month=9,
        year=2030,
        verification_value="123",
    )
    options = PaymentOptions(
        order_id="order-1001",
        email="buyer@example.com",
        billing_address=Address(
            name="Longbob Longsen", address1="1234 Levesque St.", city="Montreal",
            state="QC", zip="H2C1X8", country="CA", phone="555-555-5555",
        ),
    )
    purchase = connector.purchase(1500, card, options)
    print("Purchase:", purchase.model_dump_json())
    if purchase.success:
        refund = connector.refund(1500, purchase.authorization)
        print("Refund:", refund.model_dump_json())

if __name__ == "__main__":
    run()
