from pixhash import HashConfig, PerceptualHash, hash_file

a = hash_file("./a.jpg", algorithm="phash")
b = hash_file("./b.jpg", algorithm="phash")
print("a:", a, "b:", b, "distance:", a - b)

hasher = PerceptualHash(HashConfig.load_preset("fine"))
print(hasher.metadata())
