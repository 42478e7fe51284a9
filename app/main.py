import sys
import os
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from shop_cart.catalog import DiscountCatalog
from shop_cart.config import settings
from shop_cart.errors import CartError
from shop_cart.logging_config import setup_logging
from shop_cart.service import CartService
from shop_cart.transforms import is_expired, load_discounts


# ============ Кэширование данных ============
@st.cache_resource
def get_catalog() -> DiscountCatalog:
    setup_logging(settings.log_level)
    if not os.path.exists(settings.discounts_path):
        return DiscountCatalog()
    return load_discounts(settings.discounts_path)


# ============ Инициализация ============
st.set_page_config(
    page_title="Shop Cart",
    page_icon="🛒",
    layout="wide",
)

catalog = get_catalog()

if "cart" not in st.session_state:
    st.session_state.cart = CartService(catalog)

cart: CartService = st.session_state.cart


def format_price(value: float) -> str:
    return f"{value:.{settings.decimals}f} {settings.currency}"


# ============ HEADER ============
st.title("🛒 Корзина")

# ============ SIDEBAR - добавление товара ============
with st.sidebar:
    st.header("➕ Добавить товар")
    with st.form("add_product", clear_on_submit=True):
        product_id = st.text_input("ID")
        name = st.text_input("Название")
        price = st.text_input("Цена", "1.00")
        quantity = st.text_input("Количество", "1")
        submitted = st.form_submit_button("Добавить", type="primary")

    if submitted:
        try:
            cart.add_product(
                {"id": product_id, "name": name, "price": price, "quantity": quantity}
            )
            st.success(f"✅ {name} × {quantity}")
        except CartError as e:
            st.error(f"❌ {e}")

    st.divider()
    st.header("🏷️ Коды скидок")
    discounts = catalog.list_all()
    if not discounts:
        st.caption("Каталог скидок пуст")
    else:
        now = cart.clock()
        for d in discounts:
            value = f"{d.percentage:g}%" if d.kind == "percentage" else format_price(d.amount)
            status = "⌛" if is_expired(d, now) else "✅"
            st.write(f"{status} `{d.code}`: {value}, до {d.expiration_date:%Y-%m-%d}")


# ============ Позиции ============
summary = cart.summary()

if not summary["items"]:
    st.info("🛍️ Корзина пуста. Добавьте товар в боковой панели.")
else:
    for p in summary["items"]:
        cols = st.columns([5, 2, 2, 1])
        with cols[0]:
            st.write(f"**{p.name}**")
            st.caption(p.id)
        with cols[1]:
            st.write(f"× {p.quantity:g}")
        with cols[2]:
            st.write(format_price(p.price * p.quantity))
        with cols[3]:
            if st.button("➖", key=f"remove_{p.id}"):
                cart.remove_product(p.id)
                st.rerun()

st.divider()

# ============ Скидка ============
col1, col2 = st.columns([3, 1])
with col1:
    code = st.text_input("Код скидки", key="discount_code")
with col2:
    st.write("")
    if st.button("Применить", use_container_width=True):
        try:
            cart.apply_discount(code.strip())
            st.rerun()
        except CartError as e:
            st.error(f"❌ {e}")

if summary["discount_code"]:
    st.caption(f"Применён код `{summary['discount_code']}`")
    if st.button("Убрать скидку", key="clear_discount"):
        cart.clear_discount()
        st.rerun()

# ============ Итоги ============
col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("📦 Товаров", f"{summary['count']:g}")
with col2:
    st.metric("🧾 Сумма", format_price(summary["subtotal"]))
with col3:
    st.metric("🏷️ Скидка", format_price(summary["discount"]))
with col4:
    st.metric("💰 Итого", format_price(summary["total"]))
