"""Reference gram weights for common produce units.

Values follow USDA FoodData Central standard reference portions.
"""

from ingredient_catalog.domain.produce import ProduceWeightEntry

PRODUCE_WEIGHTS: tuple[ProduceWeightEntry, ...] = (
    ProduceWeightEntry("broccoli", "cup_chopped", 91, "vegetable"),
    ProduceWeightEntry("broccoli", "cup_cooked", 156, "vegetable"),
    ProduceWeightEntry("broccoli", "medium_stalk", 148, "vegetable"),
    ProduceWeightEntry("spinach", "cup_raw", 30, "vegetable"),
    ProduceWeightEntry("spinach", "cup_cooked", 180, "vegetable"),
    ProduceWeightEntry("spinach", "oz", 28, "vegetable"),
    ProduceWeightEntry("kale", "cup_raw", 20, "vegetable"),
    ProduceWeightEntry("kale", "cup_chopped", 67, "vegetable"),
    ProduceWeightEntry("kale", "cup_cooked", 130, "vegetable"),
    ProduceWeightEntry("bell pepper", "medium", 119, "vegetable"),
    ProduceWeightEntry("bell pepper", "large", 150, "vegetable"),
    ProduceWeightEntry("bell pepper", "cup_chopped", 120, "vegetable"),
    ProduceWeightEntry("bell pepper", "cup_sliced", 70, "vegetable"),
    ProduceWeightEntry("zucchini", "medium", 196, "vegetable"),
    ProduceWeightEntry("zucchini", "small", 130, "vegetable"),
    ProduceWeightEntry("zucchini", "cup_chopped", 124, "vegetable"),
    ProduceWeightEntry("zucchini", "cup_sliced", 113, "vegetable"),
    ProduceWeightEntry("zucchini", "cup_cooked", 180, "vegetable"),
    ProduceWeightEntry("asparagus", "cup_cooked", 180, "vegetable"),
    ProduceWeightEntry("asparagus", "spear", 16, "vegetable"),
    ProduceWeightEntry("asparagus", "bunch", 340, "vegetable"),
    ProduceWeightEntry("green beans", "cup_raw", 110, "vegetable"),
    ProduceWeightEntry("green beans", "cup_cooked", 125, "vegetable"),
    ProduceWeightEntry("carrot", "medium", 61, "vegetable"),
    ProduceWeightEntry("carrot", "large", 72, "vegetable"),
    ProduceWeightEntry("carrot", "cup_chopped", 128, "vegetable"),
    ProduceWeightEntry("carrot", "cup_sliced", 122, "vegetable"),
    ProduceWeightEntry("cauliflower", "cup_chopped", 107, "vegetable"),
    ProduceWeightEntry("cauliflower", "cup_cooked", 124, "vegetable"),
    ProduceWeightEntry("cauliflower", "medium_head", 588, "vegetable"),
    ProduceWeightEntry("brussels sprouts", "cup_raw", 88, "vegetable"),
    ProduceWeightEntry("brussels sprouts", "cup_cooked", 156, "vegetable"),
    ProduceWeightEntry("brussels sprouts", "sprout", 19, "vegetable"),
    ProduceWeightEntry("tomato", "medium", 123, "vegetable"),
    ProduceWeightEntry("tomato", "large", 182, "vegetable"),
    ProduceWeightEntry("tomato", "small", 91, "vegetable"),
    ProduceWeightEntry("tomato", "cup_chopped", 180, "vegetable"),
    ProduceWeightEntry("cherry tomatoes", "cup", 149, "vegetable"),
    ProduceWeightEntry("cherry tomatoes", "tomato", 17, "vegetable"),
    ProduceWeightEntry("cucumber", "medium", 201, "vegetable"),
    ProduceWeightEntry("cucumber", "cup_sliced", 119, "vegetable"),
    ProduceWeightEntry("cucumber", "cup_chopped", 133, "vegetable"),
    ProduceWeightEntry("onion", "medium", 110, "vegetable"),
    ProduceWeightEntry("onion", "large", 150, "vegetable"),
    ProduceWeightEntry("onion", "small", 70, "vegetable"),
    ProduceWeightEntry("onion", "cup_chopped", 160, "vegetable"),
    ProduceWeightEntry("onion", "cup_diced", 160, "vegetable"),
    ProduceWeightEntry("garlic", "clove", 3, "vegetable"),
    ProduceWeightEntry("garlic", "head", 40, "vegetable"),
    ProduceWeightEntry("mushrooms", "cup_sliced", 70, "vegetable"),
    ProduceWeightEntry("mushrooms", "cup_chopped", 93, "vegetable"),
    ProduceWeightEntry("mushrooms", "cup_cooked", 156, "vegetable"),
    ProduceWeightEntry("sweet potato", "medium", 114, "vegetable"),
    ProduceWeightEntry("sweet potato", "large", 180, "vegetable"),
    ProduceWeightEntry("sweet potato", "cup_cubed", 133, "vegetable"),
    ProduceWeightEntry("sweet potato", "cup_cooked", 200, "vegetable"),
    ProduceWeightEntry("potato", "medium", 213, "vegetable"),
    ProduceWeightEntry("potato", "large", 299, "vegetable"),
    ProduceWeightEntry("potato", "small", 170, "vegetable"),
    ProduceWeightEntry("russet potato", "medium", 213, "vegetable"),
    ProduceWeightEntry("russet potato", "large", 299, "vegetable"),
    ProduceWeightEntry("red potato", "medium", 170, "vegetable"),
    ProduceWeightEntry("red potato", "small", 113, "vegetable"),
    ProduceWeightEntry("cabbage", "cup_shredded", 89, "vegetable"),
    ProduceWeightEntry("cabbage", "cup_chopped", 89, "vegetable"),
    ProduceWeightEntry("cabbage", "cup_cooked", 150, "vegetable"),
    ProduceWeightEntry("celery", "stalk", 40, "vegetable"),
    ProduceWeightEntry("celery", "cup_chopped", 101, "vegetable"),
    ProduceWeightEntry("corn", "ear", 90, "vegetable"),
    ProduceWeightEntry("corn", "cup", 154, "vegetable"),
    ProduceWeightEntry("corn", "cup_cooked", 164, "vegetable"),
    ProduceWeightEntry("eggplant", "medium", 458, "vegetable"),
    ProduceWeightEntry("eggplant", "cup_cubed", 82, "vegetable"),
    ProduceWeightEntry("eggplant", "cup_cooked", 99, "vegetable"),
    ProduceWeightEntry("romaine lettuce", "cup_shredded", 47, "vegetable"),
    ProduceWeightEntry("romaine lettuce", "leaf", 24, "vegetable"),
    ProduceWeightEntry("lettuce", "cup_shredded", 47, "vegetable"),
    ProduceWeightEntry("arugula", "cup", 20, "vegetable"),
    ProduceWeightEntry("bok choy", "cup_shredded", 70, "vegetable"),
    ProduceWeightEntry("bok choy", "cup_cooked", 170, "vegetable"),
    ProduceWeightEntry("bok choy", "head", 300, "vegetable"),
    ProduceWeightEntry("butternut squash", "cup_cubed", 140, "vegetable"),
    ProduceWeightEntry("butternut squash", "cup_cooked", 205, "vegetable"),
    ProduceWeightEntry("spaghetti squash", "cup_cooked", 155, "vegetable"),
    ProduceWeightEntry("artichoke", "medium", 128, "vegetable"),
    ProduceWeightEntry("beets", "medium", 82, "vegetable"),
    ProduceWeightEntry("beets", "cup_sliced", 136, "vegetable"),
    ProduceWeightEntry("beets", "cup_cooked", 170, "vegetable"),
    ProduceWeightEntry("radishes", "cup_sliced", 116, "vegetable"),
    ProduceWeightEntry("radishes", "radish", 9, "vegetable"),
    ProduceWeightEntry("turnips", "medium", 122, "vegetable"),
    ProduceWeightEntry("turnips", "cup_cubed", 130, "vegetable"),
    ProduceWeightEntry("snap peas", "cup", 63, "vegetable"),
    ProduceWeightEntry("sugar snap peas", "cup", 63, "vegetable"),
    ProduceWeightEntry("snow peas", "cup", 63, "vegetable"),
    ProduceWeightEntry("jalapeño", "pepper", 14, "vegetable"),
    ProduceWeightEntry("jalapeno", "pepper", 14, "vegetable"),
    ProduceWeightEntry("poblano pepper", "pepper", 52, "vegetable"),
    ProduceWeightEntry("mixed greens", "cup", 30, "vegetable"),
    ProduceWeightEntry("salad greens", "cup", 30, "vegetable"),
    ProduceWeightEntry("red onion", "medium", 110, "vegetable"),
    ProduceWeightEntry("red onion", "cup_sliced", 115, "vegetable"),
    ProduceWeightEntry("yellow squash", "medium", 196, "vegetable"),
    ProduceWeightEntry("yellow squash", "cup_sliced", 113, "vegetable"),
    ProduceWeightEntry("apple", "medium", 182, "fruit"),
    ProduceWeightEntry("apple", "large", 223, "fruit"),
    ProduceWeightEntry("apple", "small", 149, "fruit"),
    ProduceWeightEntry("apple", "cup_sliced", 109, "fruit"),
    ProduceWeightEntry("banana", "medium", 118, "fruit"),
    ProduceWeightEntry("banana", "large", 136, "fruit"),
    ProduceWeightEntry("banana", "small", 101, "fruit"),
    ProduceWeightEntry("blueberries", "cup", 148, "fruit"),
    ProduceWeightEntry("blueberries", "oz", 28, "fruit"),
    ProduceWeightEntry("strawberries", "cup_whole", 144, "fruit"),
    ProduceWeightEntry("strawberries", "cup_sliced", 166, "fruit"),
    ProduceWeightEntry("strawberries", "strawberry", 12, "fruit"),
    ProduceWeightEntry("raspberries", "cup", 123, "fruit"),
    ProduceWeightEntry("blackberries", "cup", 144, "fruit"),
    ProduceWeightEntry("mixed berries", "cup", 150, "fruit"),
    ProduceWeightEntry("orange", "medium", 131, "fruit"),
    ProduceWeightEntry("orange", "large", 184, "fruit"),
    ProduceWeightEntry("orange", "small", 96, "fruit"),
    ProduceWeightEntry("grapes", "cup", 151, "fruit"),
    ProduceWeightEntry("avocado", "medium", 150, "fruit"),
    ProduceWeightEntry("avocado", "half", 75, "fruit"),
    ProduceWeightEntry("avocado", "cup_sliced", 146, "fruit"),
    ProduceWeightEntry("mango", "medium", 207, "fruit"),
    ProduceWeightEntry("mango", "cup_chopped", 165, "fruit"),
    ProduceWeightEntry("pineapple", "cup_chunks", 165, "fruit"),
    ProduceWeightEntry("pineapple", "slice", 84, "fruit"),
    ProduceWeightEntry("watermelon", "cup_diced", 152, "fruit"),
    ProduceWeightEntry("watermelon", "wedge", 286, "fruit"),
    ProduceWeightEntry("cantaloupe", "cup_diced", 156, "fruit"),
    ProduceWeightEntry("peach", "medium", 150, "fruit"),
    ProduceWeightEntry("peach", "large", 175, "fruit"),
    ProduceWeightEntry("peach", "cup_sliced", 154, "fruit"),
    ProduceWeightEntry("pear", "medium", 178, "fruit"),
    ProduceWeightEntry("pear", "large", 230, "fruit"),
    ProduceWeightEntry("kiwi", "medium", 69, "fruit"),
    ProduceWeightEntry("kiwi", "large", 91, "fruit"),
    ProduceWeightEntry("cherries", "cup", 138, "fruit"),
    ProduceWeightEntry("lemon", "medium", 58, "fruit"),
    ProduceWeightEntry("lemon", "juice", 15, "fruit"),
    ProduceWeightEntry("lime", "medium", 44, "fruit"),
    ProduceWeightEntry("lime", "juice", 11, "fruit"),
    ProduceWeightEntry("black beans", "cup_cooked", 172, "legume"),
    ProduceWeightEntry("black beans", "cup_canned", 240, "legume"),
    ProduceWeightEntry("black beans", "half_cup", 86, "legume"),
    ProduceWeightEntry("chickpeas", "cup_cooked", 164, "legume"),
    ProduceWeightEntry("chickpeas", "cup_canned", 240, "legume"),
    ProduceWeightEntry("chickpeas", "half_cup", 82, "legume"),
    ProduceWeightEntry("lentils", "cup_cooked", 198, "legume"),
    ProduceWeightEntry("lentils", "half_cup", 99, "legume"),
    ProduceWeightEntry("kidney beans", "cup_cooked", 177, "legume"),
    ProduceWeightEntry("kidney beans", "cup_canned", 256, "legume"),
    ProduceWeightEntry("edamame", "cup_shelled", 155, "legume"),
    ProduceWeightEntry("edamame", "cup", 155, "legume"),
    ProduceWeightEntry("peas", "cup", 145, "legume"),
    ProduceWeightEntry("peas", "cup_cooked", 160, "legume"),
    ProduceWeightEntry("green peas", "cup", 145, "legume"),
    ProduceWeightEntry("pinto beans", "cup_cooked", 171, "legume"),
    ProduceWeightEntry("white beans", "cup_cooked", 179, "legume"),
    ProduceWeightEntry("cannellini beans", "cup_cooked", 179, "legume"),
    ProduceWeightEntry("lima beans", "cup_cooked", 170, "legume"),
    ProduceWeightEntry("split peas", "cup_cooked", 196, "legume"),
)
