# storefront
# Session-cart storefront backend
