import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

# Database models and setup
from database import SessionLocal, init_db
from models.users import User
from models.profile import Profile, AppRole
from models.product import Product, ProductImage, ProductStatus
from models.quote_request import QuoteRequest, QuoteRequestStatus
from models.quote import Quote, Incoterm, QuoteStatus
from utils.hashing import get_password_hash

# Configuration
DEMO_PASSWORD = "demo123"
DEMO_ACCOUNTS = [
    ("importer@cotaimport.example.com", "Importadora Demo", AppRole.IMPORTER),
    ("shenzhen@cotaimport.example.com", "Shenzhen Trading Co.", AppRole.EXPORTER),
    ("ningbo@cotaimport.example.com", "Ningbo Export Ltd.", AppRole.EXPORTER),
]
# End Configuration


def _ensure_account(session, email, name, role):
    user = session.query(User).filter(User.email == email).first()
    if user:
        return user.profile
    user = User(email=email, password_hash=get_password_hash(DEMO_PASSWORD))
    session.add(user)
    session.flush()
    profile = Profile(user_id=user.id, name=name, role=role)
    session.add(profile)
    session.flush()
    return profile


def seed_demo_data(session):
    """Creates demo accounts and one quoted product. Safe to run twice."""
    profiles = [_ensure_account(session, *account) for account in DEMO_ACCOUNTS]
    importer, shenzhen, ningbo = profiles

    if session.query(Product).filter(Product.owner_id == importer.id).count():
        session.commit()
        print("Demo data already present, nothing to do.")
        return profiles

    product = Product(
        owner_id=importer.id,
        name="Fone Bluetooth",
        category="Eletrônicos",
        internal_code="SKU-001",
        target_price_usd=3.00,
        description="Fone sem fio, Bluetooth 5.3, estojo de carregamento USB-C",
        status=ProductStatus.SENT_FOR_QUOTE,
    )
    product.images.append(ProductImage(url="https://placehold.co/600x400?text=Fone", is_main=True))
    session.add(product)
    session.flush()

    request = QuoteRequest(
        product_id=product.id,
        requested_by_id=importer.id,
        assigned_to_id=None,
        status=QuoteRequestStatus.COMPLETED,
        notes="Quantidade estimada: 1000 unidades por mês",
    )
    session.add(request)
    session.flush()

    session.add_all([
        Quote(quote_request_id=request.id, created_by_id=shenzhen.id, factory_name="Shenzhen Audio Factory",
              factory_location="Shenzhen, Guangdong", incoterm=Incoterm.FOB, price_per_unit_usd=2.50,
              moq=1000, lead_time_days=30, status=QuoteStatus.SUBMITTED),
        Quote(quote_request_id=request.id, created_by_id=ningbo.id, factory_name="Ningbo Sound Co.",
              factory_location="Ningbo, Zhejiang", incoterm=Incoterm.CIF, price_per_unit_usd=2.80,
              moq=500, lead_time_days=25, status=QuoteStatus.SUBMITTED),
    ])
    session.commit()
    print(f"Created demo accounts (password: {DEMO_PASSWORD}) and a sample quoted product.")
    return profiles


def populate_database():
    """Main execution function to populate database."""
    init_db()
    session = SessionLocal()
    try:
        seed_demo_data(session)
    finally:
        session.close()


if __name__ == "__main__":
    populate_database()
