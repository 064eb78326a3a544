from pvo import evaluate_expression, load_config

# Evaluate with the example configuration
config = load_config("examples/configs/example_config.json")

for line in ["and", "and or", "and or - ftt", "xor nand - ttf"]:
    result = evaluate_expression(line, config)
    value = "" if result["value"] is None else f" -> {result['value']}"
    print(f"{line}: {result['encoded']} (arity {result['arity']}){value}")
