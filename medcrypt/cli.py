# medcrypt/cli.py
import os
import sys
import secrets
import argparse
from .params import bcolors, LEGACY_CLIENT_KEY, ENV_KEY, ENV_KEY_HEX, FieldCryptoConfig
from .errors import MedcryptError
from .keystore import create_keystore, store_key_in_keystore, retrieve_key_from_keystore
from .fields import FieldEncryptor
from .serialization import read_records, write_records
from .log import configure_logging

# -----------------------------
# Key resolution
# -----------------------------
def resolve_key(args) -> bytes:
    if args.legacy_key:
        return LEGACY_CLIENT_KEY.encode("utf-8")
    if args.key_hex:
        return bytes.fromhex(args.key_hex)
    if args.key is not None:
        return args.key.encode("utf-8")
    if args.keystore and args.passphrase and args.key_name:
        return retrieve_key_from_keystore(args.passphrase, args.key_name, args.keystore)
    try:
        return FieldCryptoConfig.from_env().key
    except KeyError:
        raise MedcryptError(
            f"No key given: use --key, --key_hex, --keystore/--passphrase/--key_name, "
            f"--legacy_key, or set {ENV_KEY} / {ENV_KEY_HEX}"
        )

# -----------------------------
# Commands
# -----------------------------
def cmd_encrypt_text(args):
    result = FieldEncryptor(resolve_key(args)).codec.encode_result(args.text)
    print(result.value)
    return 0 if result.ok else 2

def cmd_decrypt_text(args):
    result = FieldEncryptor(resolve_key(args)).codec.decode_result(args.text)
    print(result.value)
    if not result.ok:
        print(f"{bcolors.WARNING}warning: {result.error.value}{bcolors.ENDC}", file=sys.stderr)
        return 2
    return 0

def cmd_encrypt_records(args):
    encryptor = FieldEncryptor(resolve_key(args))
    records = read_records(args.in_file)
    if isinstance(records, list):
        out = encryptor.encrypt_records(records)
    else:
        out = encryptor.encrypt_record(records)
    write_records(args.out_file, out)
    print(f"Encrypted to {args.out_file}")
    return 0

def cmd_decrypt_records(args):
    encryptor = FieldEncryptor(resolve_key(args))
    records = read_records(args.in_file)
    single = not isinstance(records, list)
    failed = 0
    out = []
    for i, record in enumerate([records] if single else records):
        if not isinstance(record, dict):
            out.append(record)
            continue
        decrypted, failures = encryptor.decrypt_record_checked(record)
        out.append(decrypted)
        if failures:
            failed += 1
            if args.report:
                names = ", ".join(f"{k} ({v.value})" for k, v in failures.items())
                print(f"{bcolors.WARNING}record {record.get('id', i)}: {names}{bcolors.ENDC}", file=sys.stderr)
    write_records(args.out_file, out[0] if single else out)
    print(f"Decrypted to {args.out_file}")
    if failed and args.strict:
        print(f"{bcolors.FAIL}{failed} record(s) did not decrypt cleanly{bcolors.ENDC}", file=sys.stderr)
        return 2
    return 0

def cmd_create_keystore(args):
    create_keystore(args.passphrase, args.keystore_file)
    print(f"Keystore created: {args.keystore_file}")
    return 0

def cmd_store_key(args):
    if args.generate:
        key = secrets.token_bytes(args.generate)
    elif args.key_hex:
        key = bytes.fromhex(args.key_hex)
    elif args.key is not None:
        key = args.key.encode("utf-8")
    else:
        raise MedcryptError("Nothing to store: use --key, --key_hex or --generate")
    store_key_in_keystore(args.passphrase, args.key_name, key, args.keystore_file)
    print(f"Key '{args.key_name}' stored in {args.keystore_file}")
    return 0

# -----------------------------
# Interactive menu
# -----------------------------
def _prompt_key_args() -> argparse.Namespace:
    args = argparse.Namespace(key=None, key_hex=None, keystore=None, passphrase=None,
                              key_name=None, legacy_key=False)
    use_keystore = input("Use keystore for key? (y/n) [n]: ").strip().lower() == "y"
    if use_keystore:
        args.keystore = input("Keystore filename (default keystore.json): ").strip() or "keystore.json"
        args.passphrase = input("Keystore passphrase: ")
        args.key_name = input("Key name in keystore: ")
    else:
        args.key = input("Field key (blank = legacy client key): ")
        if not args.key:
            args.key, args.legacy_key = None, True
    return args

def menu_encrypt_text():
    args = _prompt_key_args()
    args.text = input("Text to encrypt: ")
    cmd_encrypt_text(args)

def menu_decrypt_text():
    args = _prompt_key_args()
    args.text = input("Text to decrypt: ").strip()
    cmd_decrypt_text(args)

def menu_encrypt_records():
    args = _prompt_key_args()
    args.in_file = input("Records file (JSON): ").strip()
    args.out_file = input("Output filename (default records_enc.json): ").strip() or "records_enc.json"
    cmd_encrypt_records(args)

def menu_decrypt_records():
    args = _prompt_key_args()
    args.in_file = input("Encrypted records file (JSON): ").strip()
    args.out_file = input("Output filename (default records_dec.json): ").strip() or "records_dec.json"
    args.report, args.strict = True, False
    cmd_decrypt_records(args)

def menu_create_keystore():
    passphrase = input("Enter keystore passphrase: ")
    keystore_file = input("Keystore filename (default keystore.json): ").strip() or "keystore.json"
    create_keystore(passphrase, keystore_file)

def menu_store_key():
    args = argparse.Namespace(key=None, key_hex=None, generate=None)
    args.keystore_file = input("Keystore filename (default keystore.json): ").strip() or "keystore.json"
    args.passphrase = input("Keystore passphrase: ")
    args.key_name = input("Key name: ")
    key = input("Key text (blank = generate 16 random bytes): ")
    if key:
        args.key = key
    else:
        args.generate = 16
    cmd_store_key(args)

def interactive():
    _=os.system("cls") | os.system("clear")
    while True:
        print(f"{bcolors.OKCYAN}medcrypt CLI - RC5-32/12 field encryption for medical records{bcolors.ENDC}")
        print("")
        print(f"{bcolors.BOLD}1){bcolors.ENDC} Encrypt text")
        print(f"{bcolors.BOLD}2){bcolors.ENDC} Decrypt text")
        print(f"{bcolors.BOLD}3){bcolors.ENDC} Encrypt records file")
        print(f"{bcolors.BOLD}4){bcolors.ENDC} Decrypt records file")
        print(f"{bcolors.BOLD}5){bcolors.ENDC} Create encrypted keystore")
        print(f"{bcolors.BOLD}6){bcolors.ENDC} Store field key in keystore")
        print(f"{bcolors.BOLD}0){bcolors.ENDC} Exit")
        choice = input(f"{bcolors.BOLD}Choice: {bcolors.ENDC}").strip()

        try:
            match choice:
                case "0":
                    break
                case "1":
                    menu_encrypt_text()
                case "2":
                    menu_decrypt_text()
                case "3":
                    menu_encrypt_records()
                case "4":
                    menu_decrypt_records()
                case "5":
                    menu_create_keystore()
                case "6":
                    menu_store_key()
                case _:
                    print("Invalid choice")
        except (MedcryptError, OSError, ValueError) as e:
            print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e)
        _=input(f"{bcolors.OKGREEN}Any Key to Continue{bcolors.ENDC}")
        _=os.system("cls") | os.system("clear")

# -----------------------------
# CLI Main
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="medcrypt", description="RC5 field encryption for medical records")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    key_args = argparse.ArgumentParser(add_help=False)
    key_args.add_argument("--key", help="Field key as text")
    key_args.add_argument("--key_hex", help="Field key as hex")
    key_args.add_argument("--keystore", help="Keystore filename holding the field key")
    key_args.add_argument("--passphrase", help="Keystore passphrase")
    key_args.add_argument("--key_name", help="Key name in keystore")
    key_args.add_argument("--legacy_key", action="store_true", help="Use the key of the old browser client")

    enc_text = subparsers.add_parser("encrypt-text", parents=[key_args], help="Encrypt one value")
    enc_text.add_argument("--text", required=True, help="Plaintext")
    enc_text.set_defaults(func=cmd_encrypt_text)

    dec_text = subparsers.add_parser("decrypt-text", parents=[key_args], help="Decrypt one value")
    dec_text.add_argument("--text", required=True, help="Transport string")
    dec_text.set_defaults(func=cmd_decrypt_text)

    enc_rec = subparsers.add_parser("encrypt-records", parents=[key_args], help="Encrypt a JSON records file")
    enc_rec.add_argument("--in_file", required=True, help="Record, list of records or {\"data\": [...]}")
    enc_rec.add_argument("--out_file", default="records_enc.json", help="Output file")
    enc_rec.set_defaults(func=cmd_encrypt_records)

    dec_rec = subparsers.add_parser("decrypt-records", parents=[key_args], help="Decrypt a JSON records file")
    dec_rec.add_argument("--in_file", required=True, help="Record, list of records or {\"data\": [...]}")
    dec_rec.add_argument("--out_file", default="records_dec.json", help="Output file")
    dec_rec.add_argument("--report", action="store_true", help="List fields that did not decrypt cleanly")
    dec_rec.add_argument("--strict", action="store_true", help="Exit non-zero if any field did not decrypt cleanly")
    dec_rec.set_defaults(func=cmd_decrypt_records)

    create = subparsers.add_parser("create-keystore", help="Create encrypted keystore")
    create.add_argument("--passphrase", required=True, help="Keystore passphrase")
    create.add_argument("--keystore_file", default="keystore.json", help="Keystore filename")
    create.set_defaults(func=cmd_create_keystore)

    store = subparsers.add_parser("store-key", help="Store a field key in the keystore")
    store.add_argument("--passphrase", required=True, help="Keystore passphrase")
    store.add_argument("--keystore_file", default="keystore.json", help="Keystore filename")
    store.add_argument("--key_name", required=True, help="Key name in keystore")
    store.add_argument("--key", help="Key as text")
    store.add_argument("--key_hex", help="Key as hex")
    store.add_argument("--generate", type=int, metavar="BYTES", help="Generate a random key of this length")
    store.set_defaults(func=cmd_store_key)
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    if args.command is None:
        interactive()
        return 0
    try:
        return args.func(args)
    except (MedcryptError, OSError, ValueError) as e:
        print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e, file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
