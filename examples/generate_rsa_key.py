from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Writes a PEM private key for RSA-SHA1 consumers (OAUTH_RSA_KEY_FILE) and
# prints the public key to register with the provider.
if __name__ == "__main__":
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    with open("consumer_key.pem", "wb") as f:
        f.write(
            key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    print(public_pem.decode("ascii"))
