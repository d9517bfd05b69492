"""
Wallet components: BIP39 mnemonics and seeds, BIP32 extended keys, derivation paths, serialization and the HDWallet
"""
# wallet/__init__.py
from hdkeychain.wallet.derivation import *
from hdkeychain.wallet.hdwallet import *
from hdkeychain.wallet.mnemonic import *
from hdkeychain.wallet.seed import *
from hdkeychain.wallet.serialization import *
from hdkeychain.wallet.versions import *
from hdkeychain.wallet.xkeys import *
